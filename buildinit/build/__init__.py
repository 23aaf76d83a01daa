"""
Pairing of discovered builders with the images a project references, and assembly of the resulting artifacts.
"""

from .builder import BuilderImagePair, InitBuilder
from .util import SortedSet, artifacts, match_builders_to_images, strip_tags
