import sys

from plugin_report.cli import main

sys.exit(main())
