import sys

from blobstore_lib.cli import main

sys.exit(main())
