"""quakemap - USGS earthquake feed to map markers.

Functional core (quakemap.core), imperative shell (quakemap.shell),
and the MapSession that wires them together (quakemap.session).
"""
