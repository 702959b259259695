"""Allow ``python -m skillint``."""

from skillint.cli.main import main

raise SystemExit(main())
