import sys

from pleading_toolkit.cli import main

sys.exit(main())
