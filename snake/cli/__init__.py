"""The snake command-line tool for creating projects and upgrading itself."""