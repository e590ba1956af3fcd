import sys

from chat_core.cli import main

sys.exit(main())
