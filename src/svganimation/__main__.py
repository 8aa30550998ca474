from svganimation.cli import main

main()
