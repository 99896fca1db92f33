"""Domain layer: input structures, date handling and repository protocols."""
