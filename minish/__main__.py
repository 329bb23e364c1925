import sys

from minish.main import main

sys.exit(main())
