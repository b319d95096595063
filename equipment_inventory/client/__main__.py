from equipment_inventory.client.cli import main

raise SystemExit(main())
