""" Procedural galaxy generation for the fringe campaign world. """
