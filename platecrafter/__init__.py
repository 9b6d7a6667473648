"""PlateCrafter: 96-well plate layout designer."""
