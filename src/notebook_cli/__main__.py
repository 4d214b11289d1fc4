import sys
from notebook_cli.cli import main

sys.exit(main())
