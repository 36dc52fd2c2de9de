from gemini_commit.cli.main import main

raise SystemExit(main())
