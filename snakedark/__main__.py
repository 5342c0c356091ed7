from snakedark.app import main

main()
