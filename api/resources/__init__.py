"""
Generic CRUD over the song and banner collections.

`descriptors.py` names each resource type once; repository, service and
router are written against a `ResourceType` and never per collection.
"""
