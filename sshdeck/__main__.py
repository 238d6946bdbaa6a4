import sys

from sshdeck.cli import main

sys.exit(main())
