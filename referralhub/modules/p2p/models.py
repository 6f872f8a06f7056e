# P2P fund wallet transfers
# Balances move inside the process_p2p_transfer database function; the service only
# validates the request and forwards it.

"""
RPCs:
- search_users_for_p2p(search_term, search_type, current_user_id)
  -> [{id, username, email, referral_code, rank, account_status}]
- process_p2p_transfer(sender_id_param, receiver_id_param, amount_param,
  transfer_type_param, receiver_identifier_param, description_param)
  -> {success, transfer_id?, message?}
- get_user_transfer_history(user_id_param, limit_param) -> see transactions/models.py

p2p_transfers (written by the RPC):
- id, sender_id, receiver_id, amount, fee, net_amount, transfer_type,
  receiver_identifier, description, status, created_at
"""
