# ABOUTME: Allows running the CLI with python -m mcpstack
import sys

from mcpstack.cli import main

sys.exit(main())
