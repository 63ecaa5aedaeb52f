import sys

from scalar_aad.cli import main

sys.exit(main())
