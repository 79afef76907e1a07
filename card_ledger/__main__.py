import sys

from card_ledger.main import main

sys.exit(main())
