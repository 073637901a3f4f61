from lfsr_keygen.cipher import stage as cipher_stage
from lfsr_keygen.config import GeneratorConfig
from lfsr_keygen.keystream.generate import chunk_key_stream, render_trace
from lfsr_keygen.session import KeyGenSession


if __name__ == "__main__":
    session = KeyGenSession(GeneratorConfig(seed="1011001"))
    result = session.generate()

    print(render_trace(result.trace[:10]))
    print(f"taps={list(session.taps)} period={result.period} verified={session.taps_verified}")
    for line in chunk_key_stream(result.to_str()):
        print(line)

    ks = result.to_str()
    enc = cipher_stage.encrypt("hello, lfsr", ks)
    print("Encrypted:", enc.hex())
    print("Decrypted:", cipher_stage.decrypt_text(enc, ks))

    bin_cfg = cipher_stage.Config(module="binary")
    enc_bits = cipher_stage.encrypt("1100101011", ks, cfg=bin_cfg)
    print("Encrypted Binary:", enc_bits)
    print("Decrypted Binary:", cipher_stage.decrypt(enc_bits, ks, cfg=bin_cfg))
