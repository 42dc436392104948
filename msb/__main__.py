from .makefile import main

main()
