import sys

from vhd_migrate.cli import main

sys.exit(main())
