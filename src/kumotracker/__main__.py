import sys

from kumotracker.cli import main

sys.exit(main())
