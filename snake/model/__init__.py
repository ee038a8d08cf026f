"""User records and SQL WHERE clause building."""