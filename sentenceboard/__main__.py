from sentenceboard.ui.app import main

main()
