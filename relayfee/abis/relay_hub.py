# /relayfee/abis/relay_hub.py
_RELAY_DATA = {
    "components": [
        {"internalType": "uint256", "name": "gasPrice", "type": "uint256"},
        {"internalType": "address", "name": "feesReceiver", "type": "address"},
        {"internalType": "address", "name": "callForwarder", "type": "address"},
        {"internalType": "address", "name": "callVerifier", "type": "address"},
    ],
    "internalType": "struct EnvelopingTypes.RelayData", "name": "relayData", "type": "tuple",
}

_FORWARD_REQUEST = {
    "components": [
        {"internalType": "address", "name": "relayHub", "type": "address"},
        {"internalType": "address", "name": "from", "type": "address"},
        {"internalType": "address", "name": "to", "type": "address"},
        {"internalType": "address", "name": "tokenContract", "type": "address"},
        {"internalType": "uint256", "name": "value", "type": "uint256"},
        {"internalType": "uint256", "name": "gas", "type": "uint256"},
        {"internalType": "uint256", "name": "nonce", "type": "uint256"},
        {"internalType": "uint256", "name": "tokenAmount", "type": "uint256"},
        {"internalType": "uint256", "name": "tokenGas", "type": "uint256"},
        {"internalType": "uint256", "name": "validUntilTime", "type": "uint256"},
        {"internalType": "bytes", "name": "data", "type": "bytes"},
    ],
    "internalType": "struct IForwarder.ForwardRequest", "name": "request", "type": "tuple",
}

_DEPLOY_REQUEST_BODY = {
    "components": [
        {"internalType": "address", "name": "relayHub", "type": "address"},
        {"internalType": "address", "name": "from", "type": "address"},
        {"internalType": "address", "name": "to", "type": "address"},
        {"internalType": "address", "name": "tokenContract", "type": "address"},
        {"internalType": "address", "name": "recoverer", "type": "address"},
        {"internalType": "uint256", "name": "value", "type": "uint256"},
        {"internalType": "uint256", "name": "nonce", "type": "uint256"},
        {"internalType": "uint256", "name": "tokenAmount", "type": "uint256"},
        {"internalType": "uint256", "name": "tokenGas", "type": "uint256"},
        {"internalType": "uint256", "name": "validUntilTime", "type": "uint256"},
        {"internalType": "uint256", "name": "index", "type": "uint256"},
        {"internalType": "bytes", "name": "data", "type": "bytes"},
    ],
    "internalType": "struct IForwarder.DeployRequest", "name": "request", "type": "tuple",
}

RELAY_HUB_ABI = [
    {"inputs": [
        {"components": [_FORWARD_REQUEST, _RELAY_DATA], "internalType": "struct EnvelopingTypes.RelayRequest", "name": "relayRequest", "type": "tuple"},
        {"internalType": "bytes", "name": "signature", "type": "bytes"},
    ], "name": "relayCall", "outputs": [{"internalType": "bool", "name": "destinationCallSuccess", "type": "bool"}], "stateMutability": "nonpayable", "type": "function"},
    {"inputs": [
        {"components": [_DEPLOY_REQUEST_BODY, _RELAY_DATA], "internalType": "struct EnvelopingTypes.DeployRequest", "name": "deployRequest", "type": "tuple"},
        {"internalType": "bytes", "name": "signature", "type": "bytes"},
    ], "name": "deployCall", "outputs": [], "stateMutability": "nonpayable", "type": "function"},
]
