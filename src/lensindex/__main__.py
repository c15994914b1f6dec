from lensindex.ui.cli import main

main()
