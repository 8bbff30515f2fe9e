from mathfence.cli import main

raise SystemExit(main())
