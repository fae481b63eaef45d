"""
Cartoon renderer configuration.

Pricing lookup per render model and fixed generation parameters.
"""

from decimal import Decimal
from typing import Dict

# Cost per render call in USD: "analysis" covers the prompt/photo conditioning
# pass, "generation" the image-to-image diffusion pass
RENDER_PRICING: Dict[str, Dict[str, Decimal]] = {
    "timbrooks/instruct-pix2pix": {
        "analysis": Decimal("0.001"),
        "generation": Decimal("0.020"),
    },
    "stabilityai/stable-diffusion-xl-refiner-1.0": {
        "analysis": Decimal("0.001"),
        "generation": Decimal("0.035"),
    },
}
DEFAULT_RENDER_PRICING: Dict[str, Decimal] = {
    "analysis": Decimal("0.001"),
    "generation": Decimal("0.030"),
}

NEGATIVE_PROMPT = (
    "photorealistic, blurry, distorted face, extra limbs, deformed hands, "
    "text, watermark, low quality"
)

# MIME type assumed for base64 images returned inside JSON bodies
JSON_IMAGE_MIME_TYPE = "image/png"
