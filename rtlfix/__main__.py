from rtlfix.cli import main

raise SystemExit(main())
