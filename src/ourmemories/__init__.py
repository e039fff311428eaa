"""
ourmemories - Personal photo gallery and slideshow web application

A small web application for a shared photo album with features including:
- Photo upload to Cloudinary with automatic resizing and format negotiation
- Photo metadata kept in a JSON collection file
- Gallery with category filters and deletion
- Home page slideshow of randomly picked photos
- Letter pages
"""

__version__ = "0.1.0"
__author__ = "ourmemories"
__description__ = "Personal photo gallery and slideshow web application"
