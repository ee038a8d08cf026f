"""A lazy-loading container."""