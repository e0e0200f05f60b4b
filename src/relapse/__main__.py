import sys

from relapse.cli import main

sys.exit(main())
