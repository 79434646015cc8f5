import sys

from article_board.main import main

sys.exit(main())
