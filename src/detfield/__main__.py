import sys

from detfield.cli import main

sys.exit(main())
