"""javafetch - resolve, download and cache Java runtimes from vendor catalogs."""
