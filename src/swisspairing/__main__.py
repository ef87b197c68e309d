import sys

from swisspairing.cli import main

sys.exit(main())
