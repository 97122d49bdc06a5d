"""Administrative operations for internal auth and datastore services."""
