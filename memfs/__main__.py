"""Allow ``python -m memfs``."""

import sys

from memfs.main import main

if __name__ == '__main__':
    sys.exit(main())
