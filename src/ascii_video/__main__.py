from ascii_video.cli import main

raise SystemExit(main())
