from chatdeck.cli import main

main()
