"""Allow ``python -m reportmux``."""

from reportmux.cli import main

raise SystemExit(main())
