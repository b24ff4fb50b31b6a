import sys

from buildpack.cli import main

sys.exit(main())
