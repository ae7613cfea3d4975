"""Constantes criptográficas para envelopes de WhatsApp Flows."""

AES_KEY_SIZES_ALLOWED = (16, 24, 32)  # 128/192/256 bits
TAG_SIZE = 16  # 128 bits
