"""Build-time derivation of lookup data from Pulumi provider schemas."""
