#!/usr/bin/env python3
"""
GridView demo launcher.

Run this from the project root to open the sample grids.
"""

if __name__ == '__main__':
    from gridview.run_demo import main
    main()
