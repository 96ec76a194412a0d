import sys

from weathertext.cli import main

sys.exit(main())
