# /relayfee/abis/smart_wallet_factory.py
SMART_WALLET_FACTORY_ABI = [
    {"inputs": [{"internalType": "address", "name": "owner", "type": "address"}, {"internalType": "address", "name": "recoverer", "type": "address"}, {"internalType": "uint256", "name": "index", "type": "uint256"}], "name": "getSmartWalletAddress", "outputs": [{"internalType": "address", "name": "", "type": "address"}], "stateMutability": "view", "type": "function"}
]
