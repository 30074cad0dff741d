import sys

from stratfolio.cli.main import main


sys.exit(main())
