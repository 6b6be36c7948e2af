from retro_chip8.ui.app import main

main()
