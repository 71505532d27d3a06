import sys

from LookerUserBulkDelete.LookerBulkDelete import main

sys.exit(main())
