import sys

from traverse.cli import main

sys.exit(main())
