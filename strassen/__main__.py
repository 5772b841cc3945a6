import sys

from strassen.benchmark import main

sys.exit(main())
