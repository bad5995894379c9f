import sys

from alnentropy.cli import main

sys.exit(main())
