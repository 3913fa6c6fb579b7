__version_info__ = (0, 1, 0)
__version__ = ".".join("%s" % v for v in __version_info__)
__author__ = 'Yelp <yelplabs@yelp.com>'
