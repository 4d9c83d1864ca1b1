# MIT License (see LICENSE)
"""
Pairwise collision detection and impulse resolution.

Bodies are tested pairwise every frame (O(N²), no broadphase; every call
site keeps N small). Overlapping pairs are resolved with a single impulse
along the contact normal followed by a positional split of the overlap:

    j = -(1 + e) · v_rel·n / (1/m1 + 1/m2)
    v1 -= j·n / m1,  v2 += j·n / m2
    x1 -= n·overlap/2,  x2 += n·overlap/2

Pairs that are already separating (v_rel·n > 0) are left untouched.
For point particles of equal mass the animations use a plain velocity
exchange at a fixed threshold distance instead of radii.

Key concepts:
- Contact: geometric overlap info (normal from a toward b, overlap depth).
- Restitution e: 1 = elastic, 0 = perfectly inelastic. May be a callable so
  a fresh value can be drawn per collision.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable

import numpy as np

from ..types import Body
from ..util import unit

Restitution = float | Callable[[], float]


@dataclass
class Contact:
    """
    Overlap between two bodies.

    Attributes:
        a: First body.
        b: Second body.
        normal: Unit normal pointing from a toward b.
        distance: Center-to-center distance.
        overlap: Penetration depth (threshold - distance), positive.
        resolved: True once an impulse was applied.
    """
    a: Body
    b: Body
    normal: np.ndarray
    distance: float
    overlap: float
    resolved: bool = False


def detect_contact(a: Body, b: Body, threshold: float | None = None) -> Contact | None:
    """
    Test two bodies for overlap.

    Args:
        a: First body.
        b: Second body.
        threshold: Contact distance. Defaults to a.radius + b.radius.

    Returns:
        Contact if the bodies overlap, None otherwise.
    """
    reach = (a.radius + b.radius) if threshold is None else threshold
    d = b.position - a.position
    dist = float(np.hypot(d[0], d[1]))
    if dist >= reach:
        return None
    return Contact(a=a, b=b, normal=unit(d), distance=dist, overlap=reach - dist)


def relative_normal_velocity(contact: Contact) -> float:
    """Normal component of b's velocity relative to a (negative = approaching)."""
    rv = contact.b.velocity - contact.a.velocity
    return float(np.dot(rv, contact.normal))


def separate(contact: Contact) -> None:
    """Push both bodies apart by half the overlap along the normal."""
    shift = contact.normal * (0.5 * contact.overlap)
    contact.a.position -= shift
    contact.b.position += shift


def resolve_collision(contact: Contact, restitution: Restitution) -> bool:
    """
    Apply the collision impulse for a detected contact.

    Args:
        contact: Contact produced by detect_contact().
        restitution: Coefficient e, or a zero-argument callable returning e.
                     The callable is only invoked for approaching pairs.

    Returns:
        True if the pair was approaching and an impulse was applied.

    Note:
        Modifies body velocities and positions in-place.
    """
    vn = relative_normal_velocity(contact)
    if vn > 0:
        return False

    a, b = contact.a, contact.b
    k = a.inv_mass + b.inv_mass
    if k <= 0:
        return False

    e = restitution() if callable(restitution) else restitution
    j = -(1.0 + e) * vn / k
    impulse = j * contact.normal
    a.velocity -= impulse * a.inv_mass
    b.velocity += impulse * b.inv_mass

    separate(contact)
    contact.resolved = True
    return True


def exchange_velocities(contact: Contact) -> bool:
    """
    Equal-mass elastic shortcut: swap the two velocities outright.

    Used by the point-particle gases. Separating pairs are skipped so a pair
    that is still overlapping on the next frame does not swap back.

    Returns:
        True if velocities were exchanged.
    """
    if relative_normal_velocity(contact) > 0:
        return False
    a, b = contact.a, contact.b
    a.velocity, b.velocity = b.velocity.copy(), a.velocity.copy()
    separate(contact)
    contact.resolved = True
    return True


def resolve_pairwise(bodies: list[Body], restitution: Restitution) -> list[Contact]:
    """
    Detect and resolve every overlapping pair of disks.

    Complexity: O(N²).

    Returns:
        All contacts detected this pass (resolved or separating).
    """
    contacts: list[Contact] = []
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            c = detect_contact(bodies[i], bodies[j])
            if c is None:
                continue
            resolve_collision(c, restitution)
            contacts.append(c)
    return contacts


def resolve_point_pairs(bodies: list[Body], threshold: float) -> list[Contact]:
    """
    Velocity-exchange collisions for point particles within `threshold`.

    Returns:
        The contacts whose velocities were exchanged.
    """
    out: list[Contact] = []
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            c = detect_contact(bodies[i], bodies[j], threshold=threshold)
            if c is not None and exchange_velocities(c):
                out.append(c)
    return out
