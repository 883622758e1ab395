import sys

from group_trip_settlement.cli import main

sys.exit(main())
