#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# This file is part of pyMolSurf.
# Copyright (C) 2025 The pyMolSurf Project and contributors.
#
# pyMolSurf is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# pyMolSurf is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with pyMolSurf. If not, see <https://www.gnu.org/licenses/>.


"""
Topological and integral checks of triangle meshes given as vertex and triangle
arrays: edge usage, Euler characteristic, connected components and enclosed
volume.
"""

import numpy as np


def unique_edges(triangles):
    """
    Returns (edges, counts): the distinct undirected edges of `triangles` as an
    (E, 2) array with the smaller index first, and how many triangles use each.
    """
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    if triangles.shape[0] == 0:
        return np.empty((0, 2), dtype=np.int64), np.empty(0, dtype=np.int64)
    edges = np.concatenate(
        (triangles[:, [0, 1]], triangles[:, [1, 2]], triangles[:, [2, 0]]), axis=0
    )
    edges.sort(axis=1)
    return np.unique(edges, axis=0, return_counts=True)


def edge_usage(triangles):
    """Returns (boundary_edge_count, non_manifold_edge_count)."""
    _, counts = unique_edges(triangles)
    return int(np.count_nonzero(counts == 1)), int(np.count_nonzero(counts > 2))


def is_watertight(triangles):
    """True when every edge is shared by exactly two triangles."""
    _, counts = unique_edges(triangles)
    return counts.size > 0 and bool(np.all(counts == 2))


def euler_characteristic(triangles):
    """V - E + F, counting only the vertices referenced by a triangle."""
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    edges, _ = unique_edges(triangles)
    num_vertices = np.unique(triangles).size
    return int(num_vertices - edges.shape[0] + triangles.shape[0])


def _find(parent, i):
    root = i
    while parent[root] != root:
        root = parent[root]
    while parent[i] != root:
        parent[i], i = root, parent[i]
    return root


def connected_components(triangles):
    """
    Labels the triangles by connected component (triangles sharing a vertex are
    connected).

    Returns:
        tuple: (number of components, (F,) component label per triangle, labels
        numbered from 0 in order of first appearance)
    """
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    if triangles.shape[0] == 0:
        return 0, np.empty(0, dtype=np.int64)
    parent = list(range(int(triangles.max()) + 1))
    for a, b, c in triangles.tolist():
        ra = _find(parent, a)
        rb = _find(parent, b)
        if ra != rb:
            parent[rb] = ra
        rc = _find(parent, c)
        if ra != rc:
            parent[rc] = ra

    labels = np.empty(triangles.shape[0], dtype=np.int64)
    root_labels = {}
    for f, a in enumerate(triangles[:, 0].tolist()):
        root = _find(parent, a)
        labels[f] = root_labels.setdefault(root, len(root_labels))
    return len(root_labels), labels


def component_euler_characteristics(triangles):
    """Euler characteristic of each connected component, in label order."""
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    count, labels = connected_components(triangles)
    return [euler_characteristic(triangles[labels == k]) for k in range(count)]


def signed_volume(vertices, triangles):
    """
    Volume enclosed by a closed triangulation, by the divergence theorem.

    Positive when the triangles wind counter-clockwise seen from outside.
    """
    vertices = np.asarray(vertices, dtype=np.float64)
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    if triangles.shape[0] == 0:
        return 0.0
    p0 = vertices[triangles[:, 0]]
    p1 = vertices[triangles[:, 1]]
    p2 = vertices[triangles[:, 2]]
    return float(np.einsum("ij,ij->", p0, np.cross(p1, p2)) / 6.0)


def surface_area(vertices, triangles):
    """Sum of the triangle areas."""
    vertices = np.asarray(vertices, dtype=np.float64)
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    if triangles.shape[0] == 0:
        return 0.0
    p0 = vertices[triangles[:, 0]]
    cross = np.cross(vertices[triangles[:, 1]] - p0, vertices[triangles[:, 2]] - p0)
    return float(0.5 * np.linalg.norm(cross, axis=1).sum())
