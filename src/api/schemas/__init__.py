# This file marks the schemas package for request and response models.
