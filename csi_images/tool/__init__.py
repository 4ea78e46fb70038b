"""Command line tool for inspecting the csi-images catalogs."""
