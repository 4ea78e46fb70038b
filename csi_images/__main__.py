"""Run the csi-images command line tool."""

from csi_images.tool.csi_images import main

if __name__ == "__main__":
    main()
