"""Local HTTP API of the boiler controller.

Binds the provisioning, command and status routes to the request
handling services and runs them under uvicorn.
"""
