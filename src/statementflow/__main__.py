import sys

from statementflow.main import main

sys.exit(main())
