from pychange.cli import main

main()
