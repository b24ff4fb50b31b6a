"""PWA Studio buildpack.

Project scaffolding (``buildpack create-project``) and the storefront's form
validators.

Quick usage::

    from buildpack.scaffold import ProjectCreator
    from buildpack.config import ProjectParams

    params = ProjectParams(directory="my-venia", install=False)
    await ProjectCreator(params).run()
"""

__version__ = "0.1.0"
