from notestore.cli import main

main()
