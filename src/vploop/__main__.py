import sys

from vploop.cli import main

sys.exit(main())
