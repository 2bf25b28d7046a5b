"""
Editor layer.

- projection: screen <-> world <-> dense coordinate mapping
- membership: PolygonMembershipEngine (ring join + ordered insertion)
- editor: MarkerListEditor owning the canonical sequence
- config / cli: EditorConfig and the batch command line
"""
__all__ = ["projection", "membership", "editor", "config", "cli"]
