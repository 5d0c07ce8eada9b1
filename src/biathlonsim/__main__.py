import sys

from biathlonsim.cli import main

sys.exit(main())
