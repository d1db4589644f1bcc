"""killd -- local control plane of the KiLL boiler controller.

Runs on the controller itself: brings up a Wi-Fi access point, lets the
companion app provision the device once, then accepts authenticated
boiler commands and status requests over a small HTTP API.
"""

__version__ = "0.1.0"
