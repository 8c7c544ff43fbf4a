"""Domain layer for reportit application.

Services live in submodules (``reportit.domain.report`` etc.) and are imported
from there; the database layer imports ``reportit.domain.entities`` and this
package must stay import-free to keep that cycle-free.
"""
