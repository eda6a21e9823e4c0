import sys

from .sanc import main

sys.exit(main())
