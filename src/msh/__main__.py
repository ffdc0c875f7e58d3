"""Allow ``python -m msh [batch-file]``."""

from msh.repl import main

raise SystemExit(main())
