import sys

from livecast.main import main

sys.exit(main())
