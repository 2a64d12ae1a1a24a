# Services package init
"""
Shop API Backend: Services Layer
=================================

What:  The layer between routes (HTTP) and the database.
How:   Services hold the statement text / procedure names and parameter
       shapes; routes only unpack requests and pick status codes.

Service Inventory:
    - UploadService: Generated-name file storage in the upload directory
    - ProductService: Product list/create/update/delete
    - UserService: User list, credential lookup, registration
"""
