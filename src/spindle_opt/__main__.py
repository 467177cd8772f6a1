import sys

from spindle_opt.cli import main

sys.exit(main())
