import sys

from bundlescope.cli import main

sys.exit(main())
