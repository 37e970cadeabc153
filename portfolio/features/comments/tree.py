"""
Reconstruction de l'arbre des commentaires à partir des lignes plates
(chaque ligne porte un parent_id nullable).

On indexe une fois les enfants par parent_id, puis on assemble :
- `attach_direct_replies` : chaque commentaire porte ses réponses directes (1 niveau),
- `build_thread` : seulement les racines, réponses imbriquées sur toute la profondeur.

L'ordre des lignes en entrée est conservé à chaque niveau.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Set

from portfolio.features.comments.schemas import CommentOut


def index_by_parent(rows: Iterable[CommentOut]) -> Dict[Optional[str], List[CommentOut]]:
    children: Dict[Optional[str], List[CommentOut]] = defaultdict(list)
    for row in rows:
        children[row.parent_id].append(row)
    return children


def attach_direct_replies(rows: Sequence[CommentOut]) -> List[CommentOut]:
    children = index_by_parent(rows)
    return [
        row.model_copy(update={"replies": [r.model_copy(update={"replies": []}) for r in children.get(row.id, [])]})
        for row in rows
    ]


def build_thread(rows: Sequence[CommentOut]) -> List[CommentOut]:
    children = index_by_parent(rows)
    known = {row.id for row in rows}

    def _assemble(node: CommentOut, seen: Set[str]) -> CommentOut:
        seen.add(node.id)
        replies = [_assemble(child, seen) for child in children.get(node.id, []) if child.id not in seen]
        return node.model_copy(update={"replies": replies})

    seen: Set[str] = set()
    # Racines = parent_id nul, ou parent absent du projet (ligne orpheline)
    roots = [row for row in rows if row.parent_id is None or row.parent_id not in known]
    return [_assemble(root, seen) for root in roots]


def descendant_ids(comment_id: str, parent_of: Dict[str, Optional[str]]) -> Set[str]:
    """Identifiants de toutes les réponses (directes ou non) d'un commentaire."""
    children: Dict[Optional[str], List[str]] = defaultdict(list)
    for child_id, parent_id in parent_of.items():
        children[parent_id].append(child_id)

    found: Set[str] = set()
    stack = list(children.get(comment_id, []))
    while stack:
        current = stack.pop()
        if current in found:
            continue
        found.add(current)
        stack.extend(children.get(current, []))
    return found


def children_first(parent_of: Dict[str, Optional[str]]) -> List[str]:
    """
    Ordre de suppression sûr pour la FK message.parent_id : les plus profonds d'abord,
    quel que soit l'horodatage des lignes.
    """
    depth: Dict[str, int] = {}

    def _depth(comment_id: str) -> int:
        chain: List[str] = []
        current: Optional[str] = comment_id
        # remonte jusqu'à une profondeur connue, une racine ou un parent absent
        while current in parent_of and current not in depth and current not in chain:
            chain.append(current)
            current = parent_of[current]
        base = depth.get(current, -1) if current is not None else -1
        for node in reversed(chain):
            base += 1
            depth[node] = base
        return depth[comment_id]

    return sorted(parent_of, key=_depth, reverse=True)
