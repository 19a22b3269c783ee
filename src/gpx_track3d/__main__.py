from gpx_track3d.cli import main

if __name__ == "__main__":
    main()
