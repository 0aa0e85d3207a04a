import sys

from todo_lingo.cli.main import main

sys.exit(main())
