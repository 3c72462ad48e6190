NAME = "bundle"
