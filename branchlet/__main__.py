import sys

from branchlet.cli.main import main

sys.exit(main())
