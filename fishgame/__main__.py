import sys

from fishgame.main import main

sys.exit(main())
