from resilient_http.cli.main import main

raise SystemExit(main())
