import sys

from druid_ingestion.cli import main

sys.exit(main())
