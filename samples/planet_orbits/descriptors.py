"""
Planet orbits sample

    svganimation render samples/planet_orbits/planet_orbits.svg \
        samples/planet_orbits/descriptors.py:DESCRIPTORS \
        --config samples/planet_orbits/config.yaml --duration 6
"""

import math

DESCRIPTORS = {
    # Circles the sun between t = 1 and t = 5, turning once per radian
    "test": {
        "transform": [{
            "range": [1, 5],
            "local": True,
            "translate": {
                "x": lambda t: 250 + 100 * math.cos(2 * t),
                "y": lambda t: 250 + 100 * math.sin(2 * t),
            },
            "rotate": lambda t: t,
        }],
    },
    "planet": {
        "r": lambda t: 12 + 2 * math.sin(4 * t),
    },
    "moon": {
        "transform": {
            "scale": lambda t: 1 + 0.5 * math.sin(3 * t),
            "range": [0, 5],
        },
        "fill-opacity": {"equation": lambda t: 0.5, "range": 2.5},
    },
}
