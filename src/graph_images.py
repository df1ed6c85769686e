"""
Normalización de imágenes: toda operación *_picture devuelve JPEG,
sin importar el formato que entregue Facebook (gif, png, jpg).
"""

from io import BytesIO

from PIL import Image, UnidentifiedImageError

from graph_errors import ImageEncodingError


def to_jpeg(data: bytes, quality: int = 90) -> bytes:
    """Decodifica la imagen y la re-codifica como JPEG en memoria."""
    if not data:
        raise ImageEncodingError("Respuesta de imagen vacía")
    try:
        with Image.open(BytesIO(data)) as img:
            out = BytesIO()
            img.convert("RGB").save(out, format="JPEG", quality=quality)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageEncodingError(f"No pude re-codificar la imagen a JPEG: {e}") from e
    return out.getvalue()
