"""Token signing and field validation errors."""