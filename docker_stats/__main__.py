import sys

from docker_stats.cli import main

sys.exit(main())
