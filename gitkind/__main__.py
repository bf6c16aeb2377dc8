import sys

from gitkind.cli import main

sys.exit(main())
