import sys

from tonne.cli import main

sys.exit(main())
