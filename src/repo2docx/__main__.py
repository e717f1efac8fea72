from repo2docx.cli import main

raise SystemExit(main())
