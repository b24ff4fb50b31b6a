"""Command line interface.

Usage::

    buildpack create-project ./my-venia --backend-url https://magento.example.com
    buildpack create-project ./my-venia --template ../venia-concept --no-install
    python -m buildpack create-project ./my-venia --npm-client yarn
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError as PydanticValidationError

from buildpack import __version__
from buildpack.config import DEFAULT_TEMPLATE, BuildpackConfig, NpmClient, ProjectParams
from buildpack.errors import BuildpackError
from buildpack.scaffold.creator import ProjectCreator
from buildpack.utils import print_error


def build_parser() -> argparse.ArgumentParser:
    """Build the ``buildpack`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="buildpack",
        description="PWA Studio buildpack -- project scaffolding tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  buildpack create-project ./my-venia\n"
            "  buildpack create-project ./my-venia -b https://magento.example.com --no-install\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser(
        "create-project",
        help="Create a PWA project in <directory> based on template.",
        description="Create a PWA project in <directory> based on template.",
    )
    create.add_argument(
        "directory",
        help=(
            "Name or path to a directory to create and fill with the project files. "
            "This directory will be the project root."
        ),
    )

    project = create.add_argument_group("Project configuration")
    project.add_argument(
        "--template",
        default=DEFAULT_TEMPLATE,
        help=(
            'Name of a "template" to clone and customize. Currently only the '
            f'"{DEFAULT_TEMPLATE}" template is supported. Version labels are supported, '
            f"e.g. {DEFAULT_TEMPLATE}@8.0.0. A path to a local template directory also works."
        ),
    )
    project.add_argument(
        "--backend-url", "--backendUrl", "-b",
        dest="backend_url",
        help="URL of the Magento 2 instance to use as a backend. Will be added to `.env` file.",
    )
    project.add_argument(
        "--backend-edition", "--backendEdition",
        dest="backend_edition",
        help="Edition of the magento store (Enterprise Edition or Community Edition)",
    )
    project.add_argument(
        "--braintree-token", "--braintreeToken",
        dest="braintree_token",
        help=(
            "Braintree API token to use to communicate with your Braintree instance. "
            "Will be added to `.env` file."
        ),
    )

    metadata = create.add_argument_group("Metadata")
    metadata.add_argument(
        "--name", "-n",
        help='Short name of the project to put in the package.json "name" field. '
        "Uses <directory> by default.",
    )
    metadata.add_argument(
        "--author", "-a",
        help='Name and (optionally <email address>) of the author to put in the '
        'package.json "author" field.',
    )

    packages = create.add_argument_group("Package management")
    packages.add_argument(
        "--install",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Install package dependencies after creating project (default: true)",
    )
    packages.add_argument(
        "--npm-client", "--npmClient",
        dest="npm_client",
        choices=[c.value for c in NpmClient],
        default=NpmClient.NPM.value,
        help="NPM package management client to use (default: npm)",
    )
    packages.add_argument(
        "--cache",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Use cache for template packages and dependencies (default: true)",
    )
    return parser


def params_from_args(args: argparse.Namespace) -> ProjectParams:
    """Convert parsed ``create-project`` arguments to ``ProjectParams``."""
    return ProjectParams(
        directory=args.directory,
        template=args.template,
        name=args.name or "",
        author=args.author,
        backend_url=args.backend_url,
        backend_edition=args.backend_edition,
        braintree_token=args.braintree_token,
        install=args.install,
        npm_client=args.npm_client,
        cache=args.cache,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``buildpack`` and ``python -m buildpack``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        params = params_from_args(args)
    except PydanticValidationError as exc:
        print_error(f"Invalid arguments: {exc}")
        return 2

    creator = ProjectCreator(params, BuildpackConfig.from_env())
    try:
        asyncio.run(creator.run())
    except BuildpackError as exc:
        print_error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
