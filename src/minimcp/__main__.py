from minimcp.cli import main

main()
