from tora_db.cli import main

raise SystemExit(main())
