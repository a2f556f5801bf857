import sys

from axauto.cli import main

sys.exit(main())
