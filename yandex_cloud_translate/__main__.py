from yandex_cloud_translate.cli import main

raise SystemExit(main())
