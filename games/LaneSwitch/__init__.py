"""Lane Switch - dodge falling blocks by switching lanes."""
