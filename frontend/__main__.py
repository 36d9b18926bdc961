import sys

from frontend.main import main

sys.exit(main())
