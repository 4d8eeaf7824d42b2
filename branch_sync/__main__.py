from branch_sync.cli.main import main

main()
