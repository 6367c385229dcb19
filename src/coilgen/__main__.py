from __future__ import annotations

from .cli_main import main

raise SystemExit(main())
